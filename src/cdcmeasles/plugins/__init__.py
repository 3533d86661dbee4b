"""Plugin packages for cdcmeasles."""
