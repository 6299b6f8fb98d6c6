"""
icedb workflow package.

Wires the record store and the GitHub client around the fingerprint core:

    fetch-issues        GitHub -> issues file
    build-fingerprints  issues file -> fingerprints file
    find-duplicates     fingerprints file + issues file -> duplicate report
"""
