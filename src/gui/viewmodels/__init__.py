"""View models: pure derivations consumed by the Qt views."""
