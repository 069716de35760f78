"""Coreferential mention recognition and filtering."""
