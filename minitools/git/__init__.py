"""A minimal content-addressed version store kept in a .git directory."""