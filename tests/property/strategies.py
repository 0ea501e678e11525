"""
Hypothesis Strategies for Property-Based Testing

Custom strategies for generating keys, filenames and download paths.
"""

from hypothesis import strategies as st

HEX = "0123456789abcdef"


@st.composite
def transfer_keys(draw, min_bytes: int = 1, max_bytes: int = 32) -> str:
    """Generate well-formed transfer keys."""
    length = draw(st.integers(min_value=min_bytes, max_value=max_bytes))
    return draw(st.text(alphabet=HEX, min_size=2 * length, max_size=2 * length))


def filenames():
    """Generate non-empty filenames, slashes included."""
    return st.text(min_size=1, max_size=80).filter(lambda s: s.strip() != "")


@st.composite
def download_paths(draw) -> str:
    """Generate well-formed ``key/filename`` paths."""
    return f"{draw(transfer_keys())}/{draw(filenames())}"
