from enum import Enum
from typing import Optional, Union


class Mode(Enum):
    """
    Value Object representing the execution mode of a lifecycle operation.
    PREVIEW suppresses every network and process side effect.
    """
    NORMAL = "normal"
    PREVIEW = "preview"

    @property
    def is_preview(self) -> bool:
        return self is Mode.PREVIEW

    @staticmethod
    def parse(value: Optional[Union[str, "Mode"]]) -> "Mode":
        """Only the literal 'preview' selects a dry run; anything else is NORMAL."""
        if isinstance(value, Mode):
            return value
        if value == Mode.PREVIEW.value:
            return Mode.PREVIEW
        return Mode.NORMAL

    def __str__(self):
        return self.value
