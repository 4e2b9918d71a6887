"""PFT/CFT Proctor - scoring engine package."""
