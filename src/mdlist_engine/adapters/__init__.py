"""Host adapters for the list editing engine."""
