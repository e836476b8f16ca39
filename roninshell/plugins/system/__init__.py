CATEGORY_DESCRIPTION = "Shell session and operating system commands."
