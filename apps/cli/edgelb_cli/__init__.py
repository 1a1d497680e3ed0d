"""Edge load balancer command-line interface."""
