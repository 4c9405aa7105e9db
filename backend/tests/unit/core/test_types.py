"""
Unit Tests for id helpers and the GUID column type
"""
import uuid

import pytest

from devlink.core.types import GUID, canonical_uuid, new_id


class TestIds:

    def test_new_id_is_canonical(self):
        value = new_id()
        assert value == canonical_uuid(value)
        assert uuid.UUID(value).version == 4

    @pytest.mark.parametrize("spelling", [
        "0F8FAD5B-D9CB-469F-A165-70867728950E",
        "0f8fad5bd9cb469fa16570867728950e",
        "{0f8fad5b-d9cb-469f-a165-70867728950e}",
        " 0f8fad5b-d9cb-469f-a165-70867728950e ",
    ])
    def test_canonical_uuid_spellings(self, spelling):
        assert canonical_uuid(spelling) == "0f8fad5b-d9cb-469f-a165-70867728950e"

    @pytest.mark.parametrize("value", ["does-not-exist", "", None, 42])
    def test_canonical_uuid_rejects(self, value):
        assert canonical_uuid(value) is None


class TestGUID:

    def test_bind_canonicalizes(self):
        value = uuid.uuid4()
        assert GUID().process_bind_param(value, None) == str(value)
        assert GUID().process_bind_param(str(value).upper(), None) == str(value)

    def test_bind_passes_non_uuid_through(self):
        assert GUID().process_bind_param("does-not-exist", None) == "does-not-exist"
        assert GUID().process_bind_param(None, None) is None

    def test_result_is_string(self):
        assert GUID().process_result_value("abc", None) == "abc"
        assert GUID().process_result_value(None, None) is None
