"""Fixture package loaded from a private class path."""
