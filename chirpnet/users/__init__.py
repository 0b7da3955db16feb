"""User service: creating users and looking them up."""