"""
Business Logic Layer Module.

Builds the row derived from each monitoring request and hands it to the data
access layer.
"""
