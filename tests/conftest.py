#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib
import socket

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def open_file(tmp_path: pathlib.Path):
    """Open binary file handle, closed on teardown."""
    p = tmp_path / "handle.bin"
    p.write_bytes(b"0123456789ABCDEF")
    f = open(p, "rb")
    yield f
    f.close()


@pytest.fixture
def closed_file(tmp_path: pathlib.Path):
    """File handle which is already closed."""
    p = tmp_path / "closed.bin"
    p.write_bytes(b"")
    f = open(p, "rb")
    f.close()
    return f


@pytest.fixture
def open_socket():
    """Unconnected TCP socket, closed on teardown."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    yield s
    s.close()
