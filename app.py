#!/usr/bin/env python3
"""
RhymeScope Hugging Face Spaces App
Main entry point for the deployed application
"""

from rhyme_scope.app.app import main


if __name__ == "__main__":
    main()
