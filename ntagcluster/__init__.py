"""Hit, particle, taggable and candidate clusters for neutron-tagging analyses."""

__version__ = "0.1.0"