"""Search index layer — Pluggable backends for the mirrored blog index.

Built-in backends:
  - elasticsearch: Elasticsearch v8 (default)
  - opensearch: OpenSearch v2+ (Elasticsearch-compatible fork)
"""
