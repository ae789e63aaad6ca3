"""Test fixtures for the Translate Center client.

- api: A scripted fake of the API and clients wired to it
"""
