"""Table maintenance and JPL ephemeris access.

`update_deltat_table` only needs the standard library. Loading a JPL kernel
needs skyfield:
  pip install "lunaris[ephemeris]"
"""

from typing import Optional

DEFAULT_KERNEL = "de421.bsp"


def load_kernel(name: str = DEFAULT_KERNEL, directory: Optional[str] = None):
    """
    Return (timescale, kernel) from skyfield, downloading the kernel into
    `directory` (skyfield's default cache when None) on first use.
    """
    try:
        from skyfield.api import Loader, load
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "lunaris[ephemeris]"') from e

    loader = Loader(directory) if directory else load
    return loader.timescale(), loader(name)
