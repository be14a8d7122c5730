"""
ZIGROUTE CLI

Command line access to a route list: generate URLs, match URLs, list routes.
"""
