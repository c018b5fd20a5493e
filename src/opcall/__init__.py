"""opcall: typed, authenticated calls against declaratively described operations.

Converts raw command-line text into typed values, runs the authenticator
chain and assembles the execution context handed to a transport plugin.
"""

from opcall.version import __version__

__all__: list[str] = ["__version__"]
