"""Core — configuration, models, generators and use cases."""
