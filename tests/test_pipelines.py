from pipelines import Lookup, PipelineSpec, PROFILE_PIPELINE, ROLE_PIPELINE, USER_PIPELINE

CITIES = PipelineSpec(
    search_fields=("cityCode", "name"),
    lookups=(Lookup("state", "states", ("name",)),),
    projection=("cityCode", "name", "state"),
)


def stage_names(pipeline):
    return [next(iter(stage)) for stage in pipeline]


def test_build_default_stage_order():
    pipeline = CITIES.build(query={"name": "Surat"})
    assert stage_names(pipeline) == ["$match", "$lookup", "$unwind", "$sort", "$skip", "$limit", "$project"]
    assert pipeline[0] == {"$match": {"name": "Surat"}}
    assert pipeline[3] == {"$sort": {"_id": -1}}
    assert pipeline[4] == {"$skip": 0}
    assert pipeline[5] == {"$limit": 10}


def test_build_without_query_skips_match():
    assert stage_names(CITIES.build())[0] == "$lookup"


def test_pagination_and_ascending_sort():
    pipeline = CITIES.build(sort_field="name", sort_value="asc", page=3, limit=20)
    assert {"$sort": {"name": 1}} in pipeline
    assert {"$skip": 40} in pipeline
    assert {"$limit": 20} in pipeline


def test_all_results_drops_skip_and_limit():
    names = stage_names(CITIES.build(all_results=True))
    assert "$skip" not in names
    assert "$limit" not in names


def test_projection_hides_internal_id():
    project = CITIES.build()[-1]["$project"]
    assert project == {"_id": 0, "cityCode": 1, "name": 1, "state": 1}


def test_keyword_searches_own_and_joined_fields():
    pipeline = CITIES.build(keyword="sur")
    match = next(stage for stage in pipeline if "$match" in stage and "$or" in stage["$match"])
    fields = [next(iter(condition)) for condition in match["$match"]["$or"]]
    assert fields == ["cityCode", "name", "state.name"]
    assert match["$match"]["$or"][0]["cityCode"] == {"$regex": "sur", "$options": "i"}


def test_keyword_is_escaped():
    pipeline = CITIES.build(keyword="a.b*")
    match = next(stage for stage in pipeline if "$match" in stage)
    assert match["$match"]["$or"][0]["cityCode"]["$regex"] == r"a\.b\*"


def test_blank_keyword_is_ignored():
    assert stage_names(CITIES.build(keyword="   ")) == stage_names(CITIES.build())


def test_unpopulated_build_has_no_joins():
    pipeline = CITIES.build(keyword="x", populate=False)
    assert "$lookup" not in stage_names(pipeline)
    match = next(stage for stage in pipeline if "$match" in stage)
    assert len(match["$match"]["$or"]) == 2


def test_count_pipeline_ends_with_count():
    pipeline = CITIES.build_count(query={"name": "Surat"}, keyword="s", page=5, limit=50)
    assert pipeline[-1] == {"$count": "totalCount"}
    assert "$skip" not in stage_names(pipeline)
    assert "$sort" not in stage_names(pipeline)


def test_many_lookup_is_not_unwound():
    stages = ROLE_PIPELINE.build()
    assert "$unwind" not in stage_names(stages)
    lookup = stages[0]["$lookup"]
    assert lookup["localField"] == "rolePermissions"
    assert lookup["as"] == "rolePermissions"


def test_nested_lookup_goes_through_alias():
    stages = Lookup("address.city", "cities").stages()
    assert stages[0]["$lookup"]["as"] == "_address_city"
    assert stages[1] == {"$unwind": {"path": "$_address_city", "preserveNullAndEmptyArrays": True}}
    assert stages[2] == {"$addFields": {"address.city": {
        "$cond": [{"$ifNull": ["$address", False]}, "$_address_city", "$$REMOVE"]
    }}}


def test_nested_lookup_never_leaves_an_empty_parent():
    stages = Lookup("role.rolePermissions", "permissions", many=True).stages()
    assert stages[-1] == {"$addFields": {"role": {
        "$cond": [{"$eq": ["$role", {}]}, "$$REMOVE", "$role"]
    }}}


def test_user_pipeline_populates_role_permissions():
    stages = USER_PIPELINE.build()
    written = [stage["$addFields"] for stage in stages if "$addFields" in stage]
    assert any("role.rolePermissions" in fields for fields in written)
    assert "_role_rolePermissions" not in stages[-1]["$project"]


def test_profile_pipeline_joins_address_parts():
    lookups = [stage["$lookup"]["localField"] for stage in PROFILE_PIPELINE.build() if "$lookup" in stage]
    assert lookups == ["user", "gender", "address.city", "address.state", "address.country"]
