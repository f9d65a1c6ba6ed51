"""Data models for tools, results and configuration"""
