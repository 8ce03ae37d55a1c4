from oneormany.exception import EMPTY_LIST_MESSAGE, EmptyListError


def test_message():
    assert EMPTY_LIST_MESSAGE == str(EmptyListError())
    assert "custom" == str(EmptyListError("custom"))


def test_repr():
    assert (
        f"oneormany.exception.EmptyListError({EMPTY_LIST_MESSAGE!r})"
        == repr(EmptyListError())
    )
