"""Exception hierarchy for godsheet.

Nothing in here is raised from inside a derivation pass; every anomaly the
pass can meet has a recovery policy. These cover loading data files, equip
operations and roll building.
"""


class GodsheetError(Exception):
    """Base class for all godsheet errors."""

    pass


class RulesLoadError(GodsheetError):
    """Raised when there's an error loading rules data."""

    pass


class RulesValidationError(GodsheetError):
    """Raised when rules validation fails."""

    pass


class SheetLoadError(GodsheetError):
    """Raised when a character sheet file cannot be loaded or validated."""

    pass


class ItemNotFound(GodsheetError):
    """Raised when an operation names an item the character does not own."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"No owned item with id '{item_id}'")
        self.item_id = item_id


class UnknownRollTarget(GodsheetError):
    """Raised when a roll is requested for something that cannot be rolled."""

    pass


class DialogStateError(GodsheetError):
    """Raised on an illegal check-dialog state transition."""

    pass
