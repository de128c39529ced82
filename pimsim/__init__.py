"""Building blocks for a processing-in-memory DRAM simulator.

PIM command encoding, configuration parameters, CSV statistics output,
transactions, output switches and NPY file I/O.
"""

__version__ = "0.1.0"

__all__ = [
    "configuration",
    "csvwriter",
    "npy",
    "output",
    "pimcmd",
    "simobject",
    "transaction",
    "utils",
]