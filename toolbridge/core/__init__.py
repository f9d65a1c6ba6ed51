"""Core dispatch engine"""
