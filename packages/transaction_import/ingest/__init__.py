"""Input parsing for delimited transaction exports."""

from .parser import iter_candidate_records

__all__ = ["iter_candidate_records"]
