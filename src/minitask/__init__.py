"""minitask: a minimalistic single-user task manager for the terminal."""
