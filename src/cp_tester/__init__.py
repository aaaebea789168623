"""Compile-and-run test harness for competitive-programming solutions."""
