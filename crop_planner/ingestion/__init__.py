"""Loaders turning record-store JSON exports into validated models."""
