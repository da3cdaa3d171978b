"""
Feature index: which columns of a feature matrix are numerical and which
are categorical.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from pylinmodels.core.exceptions import ValidationError


class FeatureType(Enum):
    NUMERICAL = 'numerical'
    CATEGORICAL = 'categorical'


@dataclass(frozen=True)
class FeatureIndex:
    """
    Immutable per-column feature types.

    Construction:
        FeatureIndex.from_types(['numerical', 'categorical'])
        FeatureIndex.all_numerical(3)
    """
    types: tuple[FeatureType, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, 'types', tuple(_coerce(t) for t in self.types))

    @classmethod
    def from_types(cls, types: Iterable[FeatureType | str]) -> FeatureIndex:
        return cls(types=tuple(types))

    @classmethod
    def all_numerical(cls, n_columns: int) -> FeatureIndex:
        return cls(types=(FeatureType.NUMERICAL,) * n_columns)

    @classmethod
    def all_categorical(cls, n_columns: int) -> FeatureIndex:
        return cls(types=(FeatureType.CATEGORICAL,) * n_columns)

    @property
    def numerical(self) -> tuple[int, ...]:
        """Column indices of numerical features, in column order."""
        return tuple(i for i, t in enumerate(self.types) if t is FeatureType.NUMERICAL)

    @property
    def categorical(self) -> tuple[int, ...]:
        """Column indices of categorical features, in column order."""
        return tuple(i for i, t in enumerate(self.types) if t is FeatureType.CATEGORICAL)

    def __len__(self) -> int:
        return len(self.types)


def _coerce(value: FeatureType | str) -> FeatureType:
    if isinstance(value, FeatureType):
        return value
    if isinstance(value, str):
        try:
            return FeatureType(value.lower())
        except ValueError:
            pass
    valid = ', '.join(t.value for t in FeatureType)
    raise ValidationError(f"Unknown feature type: {value!r}. Valid types: {valid}")
