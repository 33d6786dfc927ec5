"""Vehicle Reports API: users and vehicle condition reports with soft delete."""
