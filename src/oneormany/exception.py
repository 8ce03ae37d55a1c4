import attr

EMPTY_LIST_MESSAGE = "Cannot create OneOrMany from an empty collection"


@attr.define(repr=False, str=False)
class EmptyListError(ValueError):
    """Raised when a OneOrMany would be built from zero elements."""

    message: str = EMPTY_LIST_MESSAGE

    def __repr__(self):
        return f"oneormany.exception.EmptyListError({self.message!r})"

    def __str__(self):
        return self.message
