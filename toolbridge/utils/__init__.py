"""Helpers for terminal output and logging"""
