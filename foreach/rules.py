"""
Fixed rules for line handling and placeholder syntax.

These are not configurable; they are collected here so every stage agrees.
"""

PROGRAM_NAME = "for-each"
VERSION = "1.0.0"

UTF8_BOM = b"\xef\xbb\xbf"
CARRIAGE_RETURN = b"\r"
LINE_FEED = b"\n"

FIELD_BLANKS = " \t"  # trimmed from lines and fields; NOT str.strip() whitespace
TAB = "\t"

PLACEHOLDER_SIGIL = "$"
RAW_LINE_MARK = "*"
LINE_NUMBER_MARK = "#"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_EXEC_FAILED = 127  # what a forked child reports when execvp fails
EXIT_INTERRUPTED = 130
