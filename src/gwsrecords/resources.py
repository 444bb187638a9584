from dataclasses import asdict
from typing import Any

def _prune(value: Any) -> Any:
    """
    Drop None members out of nested dicts, list positions are kept.  The sheets API treats a present
    null as a set member which breaks the oneof style resources like ExtendedValue.
    """
    if isinstance(value, dict):
        return {k: _prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune(v) for v in value]
    return value

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Common base makes it easy to filter with isinstance and gives all resources
    the same translation to the raw dicts the GWS client wants.
    """
    def to_base(self) -> dict:
        """
        Default just return the dict representation of the object as needed by
        the GWS client, without any unset (None) members.
        Call fixup() first to ensure all fields are in correct format.
        """
        self.fixup()
        return _prune(asdict(self))

    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass
