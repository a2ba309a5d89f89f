"""Command line client for the DevConnector API."""
