"""Core infrastructure: configuration, exceptions, logging and database"""
