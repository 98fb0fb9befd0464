"""Functionality to be exposed in the command line"""
