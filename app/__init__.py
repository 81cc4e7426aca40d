"""Diagnostics HTTP application"""
