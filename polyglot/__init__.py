"""Polyglot Chat: multilingual relay in front of a local Ollama server."""
