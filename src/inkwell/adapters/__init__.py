"""Host adapters for the authoring engine."""
