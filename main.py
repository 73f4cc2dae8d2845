#!/usr/bin/env python3
"""
Main entry point for the WebSocket IRC client
"""

from wsirc.main import run

if __name__ == "__main__":
    run()
