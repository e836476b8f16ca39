CATEGORY_DESCRIPTION = "Move around and inspect the filesystem."
