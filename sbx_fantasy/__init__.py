"""SBX fantasy league backend."""
