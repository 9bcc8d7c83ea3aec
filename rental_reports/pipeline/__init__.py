"""
Pipeline package: extraction of detail rows and summary maintenance.
"""

from rental_reports.pipeline.aggregator import append_detail, apply_to_summary, verify_summary
from rental_reports.pipeline.extractor import Lookup, extract_details, load_details

__all__ = [
    "append_detail",
    "apply_to_summary",
    "verify_summary",
    "Lookup",
    "extract_details",
    "load_details",
]
