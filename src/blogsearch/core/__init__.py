"""Core synchronization layer — keeps the relational store and search index in step."""
