from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from dto.Fingerprint import Fingerprint


class FingerprintGroup(BaseModel):
    """
    A distinct fingerprint and the numbers of every issue that produced it.
    """
    model_config = ConfigDict(frozen=True)

    fingerprint: Fingerprint
    # Always ascending and distinct.
    issues: Tuple[int, ...]

    @field_validator("issues")
    @classmethod
    def _sorted_distinct(cls, issues: Tuple[int, ...]) -> Tuple[int, ...]:
        if not issues:
            raise ValueError("a fingerprint group must link at least one issue")
        return tuple(sorted(set(issues)))


class DuplicateSignal(BaseModel):
    """
    A group that looks like one crash reported several times.
    """
    model_config = ConfigDict(frozen=True)

    group: FingerprintGroup
    any_open: bool
    open_issues: Tuple[int, ...] = ()
    # Linked numbers missing from the issue snapshot; treated as not open.
    unresolved_issues: Tuple[int, ...] = ()
