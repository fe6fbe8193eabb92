import iconsmith
from iconsmith.version import get_version


def test_version_is_exposed() -> None:
    assert isinstance(get_version(), str)
    assert get_version() == iconsmith.__version__
