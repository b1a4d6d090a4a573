"""Domain services: hierarchy rules, registrations, cascades."""
