from datetime import time, timedelta

import pytest

from src.attendease.attendease.database.bootstrap import iter_sql_statements
from src.attendease.attendease.database.mysql_base import normalize_mysql_time


def test_split_statements_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); UPDATE t SET x=\"c;d\";\nSELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'UPDATE t SET x="c;d"',
        "SELECT 1",
    ]


def test_split_statements_handles_escaped_quote():
    sql = "INSERT INTO t VALUES ('it\\'s; fine');"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('it\\'s; fine')"]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        (time(9, 30), time(9, 30)),
        (timedelta(hours=14, minutes=15), time(14, 15)),
        ("08:30:00", time(8, 30)),
        ("16:45", time(16, 45)),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_normalize_mysql_time_rejects_other_types():
    with pytest.raises(TypeError):
        normalize_mysql_time(3.5)
