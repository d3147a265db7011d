import pytest

from lifecycle.errors import ValidationFailed
from lifecycle.listing import Filter, Page, camel, enum_filter, param_code, parse_window


def test_window_defaults():
    assert parse_window({}) == (10, 0)
    assert parse_window({"limit": "", "offset": " "}) == (10, 0)


def test_window_caps_limit():
    assert parse_window({"limit": "500"}) == (100, 0)
    assert parse_window({"limit": "60"}, max_limit=50) == (50, 0)


@pytest.mark.parametrize(
    "args,code",
    [
        ({"limit": "abc"}, "INVALID_LIMIT"),
        ({"limit": "0"}, "INVALID_LIMIT"),
        ({"limit": "-3"}, "INVALID_LIMIT"),
        ({"offset": "-1"}, "INVALID_OFFSET"),
        ({"offset": "1.5"}, "INVALID_OFFSET"),
    ],
)
def test_window_rejects_bad_values(args, code):
    with pytest.raises(ValidationFailed) as excinfo:
        parse_window(args)
    assert excinfo.value.code == code


def test_page_meta_reports_has_more():
    assert Page(items=[], total=12, limit=5, offset=5).meta() == {
        "total": 12,
        "limit": 5,
        "offset": 5,
        "hasMore": True,
    }
    assert Page(items=[], total=12, limit=5, offset=10).has_more is False


def test_name_helpers():
    assert camel("date_of_joining") == "dateOfJoining"
    assert camel("status") == "status"
    assert param_code("resourceType") == "RESOURCE_TYPE"
    assert param_code("lowStock") == "LOW_STOCK"


def test_filter_parsing():
    assert Filter(column="employee_id", kind="int").parse("employeeId", "7") == 7
    assert Filter(kind="bool").parse("lowStock", "Yes") is True
    assert Filter(kind="bool").parse("lowStock", "0") is False
    assert Filter(kind="date").parse("date", "2024-02-29") == "2024-02-29"
    assert enum_filter("status", ["open", "closed"]).parse("status", "open") == "open"


@pytest.mark.parametrize(
    "spec,param,raw,code",
    [
        (Filter(kind="int"), "employeeId", "seven", "INVALID_EMPLOYEE_ID"),
        (Filter(kind="bool"), "lowStock", "maybe", "INVALID_LOW_STOCK"),
        (Filter(kind="date"), "date", "2023-02-29", "INVALID_DATE"),
        (enum_filter("status", ["open"]), "status", "shut", "INVALID_STATUS"),
    ],
)
def test_filter_rejects_bad_values(spec, param, raw, code):
    with pytest.raises(ValidationFailed) as excinfo:
        spec.parse(param, raw)
    assert excinfo.value.code == code
