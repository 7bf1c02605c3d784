"""Shared test fixtures for Defect Insight."""

import pytest

from defect_insight.config import DetectorConfig
from defect_insight.persistence import ResultStore

# Header in the NASA MDP style (v(g)/ev(g)/iv(g) columns, textual defects flag)
NASA_HEADER = (
    "loc,v(g),ev(g),iv(g),n,v,l,d,i,e,b,t,lOCode,lOComment,lOBlank,"
    "locCodeAndComment,uniq_Op,uniq_Opnd,total_Op,total_Opnd,branchCount"
)


def nasa_line(**overrides) -> str:
    """One CSV data line matching NASA_HEADER; all metrics 0 unless overridden."""
    values = {name: "0" for name in NASA_HEADER.split(",")}
    values.update({k: str(v) for k, v in overrides.items()})
    return ",".join(values[name] for name in NASA_HEADER.split(","))


@pytest.fixture
def zero_row():
    """Raw row with every canonical metric present and zero."""
    return {
        "loc": 0,
        "vg": 0,
        "ev": 0,
        "iv": 0,
        "n": 0,
        "v": 0,
        "l": 0,
        "d": 0,
        "i": 0,
        "e": 0,
        "t": 0,
        "lOCode": 0,
        "lOComment": 0,
        "lOBlank": 0,
        "locCodeAndComment": 0,
        "uniq_Op": 0,
        "uniq_Opnd": 0,
        "total_Op": 0,
        "total_Opnd": 0,
        "branchCount": 0,
    }


@pytest.fixture
def nasa_csv():
    """Three-module CSV: one cyclomatic defect, one clean, one branch-dense."""
    return "\n".join(
        [
            NASA_HEADER,
            nasa_line(loc=40, **{"v(g)": 12, "ev(g)": 1}),
            nasa_line(loc=10, **{"v(g)": 2}),
            nasa_line(loc=60, branchCount=25, lOCode=30, lOComment=10, e=100),
        ]
    )


@pytest.fixture
def store(tmp_path):
    return ResultStore(tmp_path / "data" / "results.db")


@pytest.fixture
def config(tmp_path):
    return DetectorConfig(data_dir=str(tmp_path / "data"))


@pytest.fixture
def csv_line():
    """Factory for NASA-style data lines; see ``nasa_line``."""
    return nasa_line


@pytest.fixture
def csv_header():
    return NASA_HEADER
