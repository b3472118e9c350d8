"""See and change the default web browser."""
