"""Persistence collaborators"""
