"""
Reporting layer: plain-text formatters for CLI output.

Modules
-------
formatters : format_record / format_ranking / format_algorithm_comparison
             + analytics formatters: pure functions returning strings.
"""
