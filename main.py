#!/usr/bin/env python3
"""
DNS Records Sync - Main Entry Point

This is the main entry point for ddns-sync.
It can be run directly or imported as a module.
"""

from ddns_sync.cli.main import main

if __name__ == "__main__":
    main()
