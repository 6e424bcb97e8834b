"""Document summarizer backed by a remote text-processing API."""
