from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):  # type: ignore[misc]
    """
    Base for every wire schema.

    Fields are declared in snake_case and serialized in camelCase
    (``next_cursor`` -> ``nextCursor``). Both spellings are accepted on
    input so the client SDK can parse server payloads directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
