from pydantic import BaseModel, ConfigDict, Field, create_model


class RequestSchema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


def code_request(field_name):
    """Schema for bodies that carry one business code, e.g. {"roleCode": "ROLE-..."}."""
    return create_model(
        f"{field_name[0].upper()}{field_name[1:]}Request",
        __base__=RequestSchema,
        **{field_name: (str, Field(min_length=1))},
    )
