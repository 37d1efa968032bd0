"""
translation_seo/core/reporting

Float rendering and CSV table writers shared by the score and analyze workers.
"""
from .formatters import format_float, format_score
from .tables import results_header, results_row, write_matrix, write_results_csv, write_summary_table

__all__ = [
    # Formatters
    "format_float",
    "format_score",
    # Tables
    "results_header",
    "results_row",
    "write_matrix",
    "write_results_csv",
    "write_summary_table",
]
