#!/usr/bin/env python3
"""
Main entry point for the credential lifecycle service
"""

from credential_lifecycle.main import run

if __name__ == "__main__":
    run()
