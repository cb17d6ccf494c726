"""Cosmic Forecast HTTP service: Earth and space weather in one model."""
