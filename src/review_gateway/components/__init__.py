from .data_store import DataStore, ProbeResult
from .text_generator import TextGenerator


__all__ = ["DataStore", "ProbeResult", "TextGenerator"]
