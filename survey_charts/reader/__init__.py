"""Tabular readers for delimited text and workbooks."""
