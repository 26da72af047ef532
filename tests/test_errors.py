"""Unit tests for pagesmith.engine.errors — Error hierarchy & serialization."""

import json

import pytest

from pagesmith.engine.errors import (
    PageConflictError,
    PageNotFoundError,
    PagesmithConfigError,
    PagesmithError,
    PageValidationError,
    ProtectedPageError,
)


class TestPagesmithError:
    """Base error class tests."""

    def test_basic_creation(self):
        err = PagesmithError("something broke")
        assert err.message == "something broke"
        assert str(err) == "something broke"
        assert err.error_type == "PagesmithError"
        assert err.page_id is None
        assert err.artifact is None

    def test_context_fields(self):
        err = PagesmithError("fail", page_id="about", artifact="handler", path="core/views.py")
        assert err.page_id == "about"
        assert err.artifact == "handler"
        assert err.path == "core/views.py"

    def test_to_dict(self):
        err = PagesmithError("fail", page_id="about", attempt=2)
        d = err.to_dict()
        assert d["error_type"] == "PagesmithError"
        assert d["message"] == "fail"
        assert d["page_id"] == "about"
        assert d["context"] == {"attempt": "2"}
        assert "timestamp" in d

    def test_to_json(self):
        parsed = json.loads(PagesmithError("fail").to_json())
        assert parsed["error_type"] == "PagesmithError"
        assert parsed["message"] == "fail"

    def test_repr(self):
        err = PagesmithError("fail", page_id="about", artifact="route")
        assert repr(err) == "PagesmithError: fail | page_id=about | artifact=route"


class TestSubclasses:
    @pytest.mark.parametrize("cls", [
        PageValidationError,
        PageNotFoundError,
        PageConflictError,
        ProtectedPageError,
        PagesmithConfigError,
    ])
    def test_hierarchy(self, cls):
        err = cls("x")
        assert isinstance(err, PagesmithError)
        assert err.error_type == cls.__name__

    def test_validation_error_keeps_raw(self):
        err = PageValidationError("invalid page name", raw=" /Bad Name/ ", page_id="bad name")
        assert err.raw == " /Bad Name/ "
        assert err.to_dict()["raw"] == " /Bad Name/ "

    def test_conflict_destination(self):
        err = PageConflictError("occupied", page_id="about", destination="team")
        assert err.destination == "team"

    def test_config_error_validation_list(self):
        err = PagesmithConfigError("Invalid configuration", validation_errors=["bad name"])
        assert err.validation_errors == ["bad name"]
        assert err.to_dict()["validation_errors"] == ["bad name"]

    def test_catchable_as_base(self):
        with pytest.raises(PagesmithError):
            raise ProtectedPageError("'home' is protected", page_id="home")
