"""Host adapters for the cursor engine."""
