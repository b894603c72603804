"""Shared helpers: geometry, history, logging, paths"""
