"""modules/estimation — Duration estimation and pickup suggestions."""
