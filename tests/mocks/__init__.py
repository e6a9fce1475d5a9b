"""In-memory fakes shared by the test suite."""
