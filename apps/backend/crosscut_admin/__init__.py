"""
CrossCut Admin API: administrative backend over the CrossCut BPO audit trail.
"""
