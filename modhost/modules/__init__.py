"""Built-in modules, discovered through the default "self:modhost.modules" descriptor."""
