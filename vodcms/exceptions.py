"""
Errors raised by the episode resync.

Every fatal failure of a run is one of the ``EpisodeSyncError`` subclasses
below. Malformed legacy play data is not an error: the parser degrades it to
fewer or empty source groups.
"""


class EpisodeSyncError(Exception):
    """Base class for episode resync failures."""


class ConfigurationMissingError(EpisodeSyncError):
    """Connection settings are absent or unusable. Nothing was touched."""


class SchemaApplicationError(EpisodeSyncError):
    """Creating the normalized tables failed. Nothing was truncated."""


class StorageIOError(EpisodeSyncError):
    """A datastore read or write failed mid-run.

    The normalized tables may be left truncated and partially rebuilt;
    the only remediation is a fresh full run.
    """
