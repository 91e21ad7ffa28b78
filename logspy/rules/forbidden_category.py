from logspy.models.log_entry import LogEntry


class ForbiddenCategoryRule:
    """Flags entries whose category starts with a forbidden prefix (any case)."""

    def __init__(self, *categories: str):
        self.categories = [category for category in categories if category is not None]
        self._folded = tuple(category.casefold() for category in self.categories)

    def is_violated_by(self, entry: LogEntry) -> bool:
        if not entry.category:
            return False
        category = entry.category.casefold()
        return any(category.startswith(prefix) for prefix in self._folded)

    @property
    def violation_message(self) -> str:
        return (
            "Category is forbidden. "
            f"Forbidden categories: [{', '.join(self.categories)}]."
        )
