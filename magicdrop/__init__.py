"""
magicdrop: deploy and configure MagicDrop NFT collections on EVM chains
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("magicdrop")
except PackageNotFoundError:
    __version__ = None
