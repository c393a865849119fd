"""
Data models for field profiling.

A Field is classified once into a Variant; each variant has its own summary
model, which renders the report text for that field. Reports are collected
into a Document in original field order.
"""

import json
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional, Tuple

RULE = "—" * 45


class Variant(str, Enum):
    """Classification outcome governing which summarizer runs."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Field:
    """
    One named or positional unit of the input.

    Attributes:
        name: Name from the input (None when the input has no names)
        position: 1-based position in the input
        values: pandas Series for numeric/categorical fields, the raw value
            for opaque ones
        variant: Classification result
        type_label: Short type description shown in the report
    """

    name: Optional[Hashable]
    position: int
    values: Any
    variant: Variant
    type_label: str

    @property
    def display_name(self) -> Hashable:
        return self.position if self.name is None else self.name


def format_number(value: float) -> str:
    # 3.0 -> "3", 1.58 -> "1.58", nan -> "nan"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _header(name: Hashable, type_label: str) -> List[str]:
    return [f"Name: `{name}` <{type_label}>", RULE, ""]


@dataclass
class NumericSummary:
    name: Hashable
    type_label: str
    count: int
    distinct_count: int
    missing_count: int
    missing_pct: float
    min: float
    max: float
    mean: float
    median: float
    stddev: float
    iqr: float
    kurtosis: float
    skewness: float
    head_sample: str
    tail_sample: str
    density_plot_text: str
    density_note: str = ""

    def render(self) -> str:
        lines = _header(self.name, self.type_label)
        lines += [
            f"head: {self.head_sample}",
            f"tail: {self.tail_sample}",
            "",
            f"Observations: {self.count}",
            f"Unique values: {self.distinct_count}",
            f"Missing: {self.missing_count} ({format_number(self.missing_pct)}%)",
            "",
            f"Range: [{format_number(self.min)}, {format_number(self.max)}]",
            f"Mean: {format_number(self.mean)} (sd: {format_number(self.stddev)})",
            f"Median: {format_number(self.median)} (IQR: {format_number(self.iqr)})",
            "",
            f"Kurtosis: {format_number(self.kurtosis)}",
            f"Skewness: {format_number(self.skewness)}",
            "",
            RULE,
            "",
            self.density_plot_text,
        ]
        if self.density_note:
            lines.append(self.density_note)
        return "\n".join(lines)


@dataclass
class CategoricalSummary:
    name: Hashable
    type_label: str
    count: int
    distinct_count: int
    missing_count: int
    missing_pct: float
    head_sample: str
    tail_sample: str
    top_values: List[Tuple[Any, int]] = dataclass_field(default_factory=list)

    def render(self) -> str:
        lines = _header(self.name, self.type_label)
        lines += [
            f"head: {self.head_sample}",
            f"tail: {self.tail_sample}",
            "",
            f"Observations: {self.count}",
            f"Unique values: {self.distinct_count}",
            f"Missing: {self.missing_count} ({format_number(self.missing_pct)}%)",
            "",
            "Most common values:",
        ]
        lines += [f"`{value}`: {count}" for value, count in self.top_values]
        return "\n".join(lines)


@dataclass
class OpaqueSummary:
    name: Hashable
    type_label: str
    length: int
    truncated: bool
    body_text: str

    def render(self) -> str:
        lines = _header(self.name, self.type_label)
        lines += [f"Length: {self.length}", "", self.body_text]
        if self.truncated:
            lines.append("...")
        return "\n".join(lines)


@dataclass(frozen=True)
class Report:
    """Final text block for one field."""

    name: Hashable
    text: str


@dataclass
class Document:
    """Ordered reports for one invocation."""

    reports: List[Report] = dataclass_field(default_factory=list)

    def to_records(self) -> List[Dict[str, Any]]:
        return [{'name': report.name, 'contents': report.text} for report in self.reports]

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_records(), indent=indent, ensure_ascii=False, default=str)

    def __len__(self) -> int:
        return len(self.reports)
