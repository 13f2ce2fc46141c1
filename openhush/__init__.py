"""Voice-to-text building blocks: VAD state, transcription queue, vocabulary, platform helpers and crash reports."""

__version__ = "0.5.0"