from srsglass.utils.errors import (
    AcquisitionError,
    FormatError,
    SrsglassError,
    UserInputError,
    ValidationError,
)


def test_taxonomy():
    for cls in (AcquisitionError, FormatError, ValidationError, UserInputError):
        assert issubclass(cls, SrsglassError)
    assert issubclass(SrsglassError, RuntimeError)


def test_context_in_message():
    e = FormatError("missing <NUMNATIONS>", region_index=4, region_name="Lazarus")
    assert str(e) == "missing <NUMNATIONS> (region #4, name='Lazarus')"
    assert e.region_index == 4


def test_position_in_message():
    e = FormatError("bad xml", line=3, column=7, byte_offset=128)
    assert "line 3, column 7" in str(e)
    assert "compressed byte 128" in str(e)


def test_plain_message():
    assert str(ValidationError("nope")) == "nope"
