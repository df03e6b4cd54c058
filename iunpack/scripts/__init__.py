"""
Command line tools provided by :py:mod:`iunpack`.
"""
