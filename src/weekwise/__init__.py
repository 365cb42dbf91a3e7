"""Weekwise - personal productivity tracker."""
