"""Core domain: contracts, engine, kinds, catalogs and configuration."""
