"""GoldJournal - trading journal and performance analytics for gold futures."""
