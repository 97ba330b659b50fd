"""Result code value object for the `res` field of Incapsula responses."""
from dataclasses import dataclass
from typing import Any

SUCCESS = "0"


@dataclass(frozen=True)
class ResultCode:
    """
    Canonical form of the `res` discriminator.

    The service sends `res` as a JSON number on most endpoints and as a
    string on others, so every value is normalised to a string before
    comparison. Only "0" means success.
    """

    value: str

    @classmethod
    def parse(cls, raw: Any) -> "ResultCode":
        """
        Normalise a decoded `res` value.

        Args:
            raw: The value as decoded from JSON (int, float, str or None)

        Returns:
            ResultCode with a canonical string value
        """
        if raw is None:
            return cls("")
        if isinstance(raw, bool):
            return cls(str(raw).lower())
        if isinstance(raw, (int, float)):
            return cls(str(int(raw)))
        return cls(str(raw).strip())

    @property
    def is_success(self) -> bool:
        """Check if the code signals success."""
        return self.value == SUCCESS

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResultCode):
            return self.value == other.value
        if isinstance(other, (int, str)) and not isinstance(other, bool):
            return self.value == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value or "<missing>"
