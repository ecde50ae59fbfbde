"""HTTP surface the hosting trigger infrastructure delivers events to."""
