"""Configuration — platform profiles, settings file, VDF manifests."""
