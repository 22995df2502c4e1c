"""User interfaces for four_word_phrase."""
