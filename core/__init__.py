"""PFT/CFT Proctor - shared configuration, logging, errors and input schemas."""
