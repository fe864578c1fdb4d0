"""RoboStats -- a Discord bot for VEX Robotics Competition team lookups."""
