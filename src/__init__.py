"""Selene Markets CLI source tree."""
