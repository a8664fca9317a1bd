"""
Test suite for docsearch.

Test Categories:
- Unit tests: One module per component (tokenizer, matcher, scorer, snippets,
  highlighter, storage, tag store, loader, config, search engine)
- Integration tests: Loader, SQLite-backed tags and search working together
- CLI tests: Command handling and output formats
"""
