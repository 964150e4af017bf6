# schemas/__init__.py
# Request body schemas (pydantic). A ValidationError raised while parsing a
# body is turned into a 400 envelope by utils/responses.py.
