"""Type aliases used across slabconf."""

from __future__ import annotations

ProfileName = str
CommandName = str
WorkflowFile = str
Region = str
ImageId = str
InstanceType = str
