"""Onboarding client: screen controllers, state and navigation."""
