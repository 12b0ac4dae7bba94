"""Format Elixir buffers through `mix format`."""

__version__ = "0.1.0"
