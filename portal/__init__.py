"""Student portal mock tests: catalog, timed attempts and scoring."""
