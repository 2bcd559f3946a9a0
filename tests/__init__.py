"""Test suite for the Acme Store API."""
