"""Core — models, services and use cases shared by the bootstrap and the core CLI."""
