"""Path-data tokenizer, normalizer and arc converter."""
