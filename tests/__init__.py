"""Test Package"""
