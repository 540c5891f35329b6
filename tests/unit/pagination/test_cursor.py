import uuid

import pytest

from socialnet.exceptions import ValidationError
from socialnet.storage.pagination.cursor import decode_cursor, encode_cursor


def test_absent_cursor_starts_from_beginning():
    assert decode_cursor(None) is None
    assert decode_cursor("") is None


def test_encoded_id_decodes_to_same_id():
    entity_id = str(uuid.uuid4())

    assert decode_cursor(encode_cursor(entity_id)) == entity_id


@pytest.mark.parametrize(
    "cursor",
    ["not-a-cursor", "123", "x" * 200, "0f8b2c1e-zzzz-4a51-9c4e-5b1d2f0a9e77"],
)
def test_malformed_cursor_rejected(cursor):
    with pytest.raises(ValidationError) as exc_info:
        decode_cursor(cursor)

    assert exc_info.value.http_status == 400
