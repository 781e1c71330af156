"""
ci_keychain — temporary macOS keychain provisioning for CI code signing.

Creates and unlocks a throwaway keychain, imports a PKCS#12 signing
certificate into it, grants codesign non-interactive key access, and puts
the keychain at the front of the user search list.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "0.1.0"
